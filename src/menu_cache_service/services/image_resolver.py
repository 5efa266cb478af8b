"""Resolution of bare image references against the remote image location."""

from urllib.parse import quote

DEFAULT_IMAGE_BASE_URL = "https://github.com/Meta-Mobile-Developer-PC/Working-With-Data-API/blob/main/images/"


def resolve_image_url(image: str, base_url: str = DEFAULT_IMAGE_BASE_URL) -> str | None:
    """Turn a stored image reference into a displayable URL.

    Bare filenames are joined to ``base_url`` with the ``?raw=true`` suffix the
    GitHub-hosted assets need. Absolute URLs pass through untouched.

    Args:
        image: Image reference as stored with the menu item
        base_url: Location the bare filenames live under

    Returns:
        The URL, or None when the item has no image
    """
    if not image:
        return None
    if image.startswith(("http://", "https://")):
        return image
    return f"{base_url.rstrip('/')}/{quote(image)}?raw=true"
