import re
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.core.errors import InvalidPost
from app.db.models.archive import Archive
from app.schemas.post import PostOut

# Never a generated id, so the OR lookup degrades to alias only
NO_ID = -1
MAX_ID = 2**63 - 1
MIN_ID = -MAX_ID - 1
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_post_id(raw: str) -> int:
    # ASCII digits only: no padding, underscores or other scripts
    if not _ID_PATTERN.fullmatch(raw):
        return NO_ID
    value = int(raw)
    if not MIN_ID <= value <= MAX_ID:
        return NO_ID
    return value


def fetch_by_id_or_alias(db: Session, raw: str) -> Optional[Archive]:
    # A numeric alias can shadow another post's id; the first row wins.
    return db.query(Archive).filter(
        or_(Archive.id == parse_post_id(raw), Archive.alias == raw)
    ).first()


def fetch_random(db: Session, tag: Optional[str] = None) -> Optional[Archive]:
    query = db.query(Archive)
    if tag is not None:
        query = query.filter(Archive.tag == tag)
    return query.order_by(func.random()).first()


def create_post(
    db: Session,
    tag: str,
    comment: Optional[str] = None,
    attachment: Optional[str] = None,
    alias: Optional[str] = None,
) -> int:
    if comment is None and attachment is None:
        raise InvalidPost("a post needs a comment or an attachment")

    new_post = Archive(tag=tag, comment=comment, attachment=attachment, alias=alias)
    db.add(new_post)
    # flush issues INSERT ... RETURNING id
    db.flush()
    return new_post.id


def delete_post(db: Session, post_id: int) -> int:
    return db.query(Archive).filter(Archive.id == post_id).delete(synchronize_session=False)


def list_distinct_tags(db: Session) -> List[str]:
    return sorted(tag for (tag,) in db.query(Archive.tag).distinct().all())


def list_by_tag(db: Session, tag: str) -> List[str]:
    posts = db.query(Archive).filter(Archive.tag == tag).all()
    keys = [PostOut.model_validate(p).display_key for p in posts]
    return sorted(keys, reverse=True)
