from urllib.parse import quote


def content_disposition(filename: str) -> str:
    """
    ``attachment`` header value that survives non-ASCII names (accents in
    professor names): an ASCII fallback plus the RFC 5987 ``filename*`` form.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
