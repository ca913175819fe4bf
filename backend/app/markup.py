"""Small BeautifulSoup helpers for building the viewer's HTML."""

from bs4 import BeautifulSoup, Tag

_PAGE_SKELETON = (
    "<!DOCTYPE html><html lang='en'><head><meta charset='utf-8'><title></title></head>"
    "<body style='font-family: sans-serif; margin: 16px'></body></html>"
)


def new_soup() -> BeautifulSoup:
    return BeautifulSoup("", "lxml")


def css(**props: str) -> str:
    """Inline style string; underscores in names become hyphens."""
    return "; ".join(f"{name.replace('_', '-')}: {value}" for name, value in props.items())


def element(soup: BeautifulSoup, name: str, *children, style: str | None = None, **attrs) -> Tag:
    """Create a tag, append *children* (tags or strings) and return it.

    ``class_`` is accepted for the reserved ``class`` attribute.
    """
    if "class_" in attrs:
        attrs["class"] = attrs.pop("class_")
    if style:
        attrs["style"] = style
    tag = soup.new_tag(name, attrs=attrs)
    for child in children:
        if child is None:
            continue
        tag.append(child if isinstance(child, Tag) else str(child))
    return tag


def page(title: str, *content: Tag) -> str:
    """Wrap *content* in a full HTML document and serialise it."""
    doc = BeautifulSoup(_PAGE_SKELETON, "lxml")
    doc.title.string = title
    for tag in content:
        doc.body.append(tag)
    return str(doc)
