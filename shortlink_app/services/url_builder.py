"""URL building utilities for short links."""

REDIRECT_PREFIX = "go"


def build_short_url(code: str, base_url: str, path_prefix: str = REDIRECT_PREFIX) -> str:
    """Build the fully-qualified short URL for a code.
    
    Args:
        code: The short code
        base_url: Scheme and host, e.g. "http://localhost:8000/"
        path_prefix: Route segment the redirect endpoint lives under
        
    Returns:
        e.g. "http://localhost:8000/go/1A2B3C4D"
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")
    
    if prefix:
        return f"{base}/{prefix}/{code}"
    return f"{base}/{code}"
