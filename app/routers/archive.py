import logging
from typing import Optional
from fastapi import APIRouter, Depends, Form, HTTPException, Path, Query, status
from sqlalchemy.exc import SQLAlchemyError
from app.core.errors import InvalidPost, friendly, get_rng
from app.core.render import render_post, render_tag_posts, render_tags
from app.crud import archive as crud
from app.db.guard import ConnectionGuard
from app.db.session import get_guard
from app.schemas.post import CreatedReply, PostOut, Reply

logger = logging.getLogger(__name__)

router = APIRouter()


def _as_post(post) -> Optional[PostOut]:
    return PostOut.model_validate(post) if post is not None else None


# search <id_or_alias>
@router.get("/search/{id_or_alias:path}", response_model=Reply)
def search_post(
    id_or_alias: str,
    guard: ConnectionGuard = Depends(get_guard),
    rng=Depends(get_rng),
):
    try:
        post = guard.with_connection(lambda db: _as_post(crud.fetch_by_id_or_alias(db, id_or_alias)))
    except SQLAlchemyError as e:
        logger.error(f"Database error while searching {id_or_alias!r}: {str(e)}")
        post = None
    if post is None:
        raise HTTPException(status_code=404, detail=friendly("Post not found", rng))
    return render_post(post)


# random [tag]
@router.get("/random", response_model=Reply)
def random_post(
    tag: Optional[str] = Query(None),
    guard: ConnectionGuard = Depends(get_guard),
    rng=Depends(get_rng),
):
    try:
        post = guard.with_connection(lambda db: _as_post(crud.fetch_random(db, tag)))
    except SQLAlchemyError as e:
        logger.error(f"Database error while drawing a random post (tag={tag!r}): {str(e)}")
        post = None
    if post is None:
        raise HTTPException(status_code=404, detail=friendly("No post found", rng))
    return render_post(post)


# create <tag> [comment] [file] [alias]
@router.post("/create", response_model=CreatedReply)
def create_post(
    tag: str = Form(...),
    comment: Optional[str] = Form(None),
    attachment: Optional[str] = Form(None),
    alias: Optional[str] = Form(None),
    guard: ConnectionGuard = Depends(get_guard),
    rng=Depends(get_rng),
):
    try:
        post_id = guard.with_connection(
            lambda db: crud.create_post(db, tag, comment=comment, attachment=attachment, alias=alias)
        )
    except InvalidPost:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=friendly("You can't archive an empty post", rng),
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error while creating a post in {tag!r}: {str(e)}")
        raise HTTPException(status_code=404, detail=friendly("No post was created", rng))

    logger.info(f"Created post {post_id} in {tag!r}")
    return CreatedReply(content=f":sunglasses: Post created with id: **{post_id}**", id=post_id)


# delete <id>
@router.delete("/{post_id}", response_model=Reply)
def delete_post(
    post_id: int = Path(..., ge=crud.MIN_ID, le=crud.MAX_ID),
    guard: ConnectionGuard = Depends(get_guard),
    rng=Depends(get_rng),
):
    try:
        deleted = guard.with_connection(lambda db: crud.delete_post(db, post_id))
    except SQLAlchemyError as e:
        logger.error(f"Database error while deleting post {post_id}: {str(e)}")
        deleted = 0
    if deleted == 0:
        raise HTTPException(status_code=404, detail=friendly("Nothing moved", rng))

    logger.info(f"Deleted post {post_id}")
    return Reply(content="Post sent back where it came from :flag_fr:")


# list tags
@router.get("/list/tags", response_model=Reply)
def list_tags(guard: ConnectionGuard = Depends(get_guard)):
    return render_tags(guard.with_connection(crud.list_distinct_tags))


# list tag <tag>
@router.get("/list/tag/{tag:path}", response_model=Reply)
def list_tag(tag: str, guard: ConnectionGuard = Depends(get_guard)):
    keys = guard.with_connection(lambda db: crud.list_by_tag(db, tag))
    return render_tag_posts(tag, keys)
