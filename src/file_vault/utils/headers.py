"""Response header helpers."""
from urllib.parse import quote


def content_disposition(filename: str, disposition: str = "attachment") -> str:
    """Build a Content-Disposition value that survives non-ASCII filenames.

    Plain ASCII names are sent as a quoted ``filename``. Anything else also
    gets an RFC 5987 ``filename*`` so the header stays latin-1 encodable.
    """
    safe_name = filename.replace("\\", "\\\\").replace('"', '\\"')
    quoted = quote(filename, safe="")
    if filename.isascii() and filename.isprintable():
        return f'{disposition}; filename="{safe_name}"'
    fallback = safe_name.encode("ascii", "replace").decode("ascii")
    fallback = "".join(c if c.isprintable() else "?" for c in fallback)
    return f"{disposition}; filename=\"{fallback}\"; filename*=utf-8''{quoted}"
