"""Turn archive rows into chat replies.

Replies use the platform's markdown flavour: ``_italic_``, ``**bold**``,
``> quote`` and ````code```` spans.
"""
from typing import Iterable, Optional
from pydantic import AnyUrl, TypeAdapter, ValidationError
from app.schemas.post import PostOut, Reply

_MARKDOWN_SPECIALS = "\\*_~|`>"
_url_adapter = TypeAdapter(AnyUrl)


def escape_markdown(text) -> str:
    return "".join("\\" + c if c in _MARKDOWN_SPECIALS else c for c in str(text))


def italic(text) -> str:
    return f"_{escape_markdown(text)}_"


def bold(text) -> str:
    return f"**{escape_markdown(text)}**"


def code(text) -> str:
    return f"``{text}``"


def image_url(attachment: Optional[str]) -> Optional[str]:
    if not attachment:
        return None
    try:
        _url_adapter.validate_python(attachment)
    except ValidationError:
        return None
    return attachment


def render_post(post: PostOut) -> Reply:
    content = (
        italic("Post N°")
        + bold(post.id)
        + italic(" created on ")
        + bold(post.created_at.strftime("%d/%m/%Y"))
    )
    if post.comment:
        content += "\n> " + post.comment
    return Reply(content=content, image=image_url(post.attachment))


def render_tags(tags: Iterable[str]) -> Reply:
    return Reply(content="Tags are: " + ", ".join(code(t) for t in tags))


def render_tag_posts(tag: str, keys: Iterable[str]) -> Reply:
    listing = ", ".join(code(k) for k in keys)
    return Reply(content=f"Posts of tag {code(tag)} are: {listing}")
