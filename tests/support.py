"""Users, resources and policies shared by the tests."""

from dataclasses import dataclass

from fastapi import Depends, FastAPI, HTTPException, Request, status

from bouncer import ActionsAuthorizer, BasePolicy, Bouncer, action, deny, register_bouncer
from bouncer.decorators import authorize
from bouncer.dependencies import get_authorizer


@dataclass
class User:
    id: int
    is_admin: bool = False
    is_banned: bool = False


@dataclass
class Post:
    id: int
    author_id: int
    is_published: bool = False


class PostPolicy(BasePolicy):
    """Policy used through the "support:PostPolicy" import string."""

    @action(allow_guest=True)
    def view(self, user, post):
        if post.is_published:
            return True
        return user is not None and user.id == post.author_id

    async def update(self, user, post):
        return user.id == post.author_id

    def delete(self, user, post):
        if user.id != post.author_id:
            return deny("Only the author can delete this post", 401)
        return True

    def _is_author(self, user, post):
        return user.id == post.author_id


class ModeratedPostPolicy(PostPolicy):
    """Admins bypass every check, banned users fail every check."""

    async def before(self, user, action, *args):
        if user is not None and user.is_banned:
            return deny("Banned users cannot do anything")
        if user is not None and user.is_admin:
            return True
        return None

    def after(self, user, action, result, *args):
        if action == "update" and not result.authorized:
            return ("Ask the author for edit rights",)
        return None


POSTS = {
    10: Post(id=10, author_id=1),
    11: Post(id=11, author_id=1, is_published=True),
}


def load_post(post_id: int) -> Post:
    """Route dependency loading a post or failing with 404."""
    post = POSTS.get(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def create_test_app(bouncer: Bouncer) -> FastAPI:
    """Blog app protected by the bouncer. X-User-Id authenticates a user."""
    app = FastAPI()
    register_bouncer(app, bouncer, profile=True)

    @app.middleware("http")
    async def authenticate(request: Request, call_next):
        user_id = request.headers.get("x-user-id")
        request.state.user = User(id=int(user_id)) if user_id else None
        return await call_next(request)

    @app.get("/posts/{post_id}")
    @authorize("view", "post", policy="post")
    async def show_post(
        post_id: int,
        post: Post = Depends(load_post),
        bouncer: ActionsAuthorizer = Depends(get_authorizer),
    ):
        return {"id": post.id}

    @app.put("/posts/{post_id}")
    async def update_post(
        post_id: int,
        post: Post = Depends(load_post),
        bouncer: ActionsAuthorizer = Depends(get_authorizer),
    ):
        await bouncer.authorize("edit-post", post)
        return {"id": post.id, "updated": True}

    @app.delete("/posts/{post_id}")
    @authorize("delete", "post", policy="post")
    async def delete_post(
        post_id: int,
        post: Post = Depends(load_post),
        bouncer: ActionsAuthorizer = Depends(get_authorizer),
    ):
        return {"id": post.id, "deleted": True}

    @app.get("/posts/{post_id}/permissions")
    async def post_permissions(
        post: Post = Depends(load_post),
        bouncer: ActionsAuthorizer = Depends(get_authorizer),
    ):
        policy = bouncer.with_policy("post")
        return {
            "update": await policy.allows("update", post),
            "delete": await policy.allows("delete", post),
        }

    @app.get("/misconfigured")
    async def misconfigured(bouncer: ActionsAuthorizer = Depends(get_authorizer)):
        await bouncer.authorize("missing-action")
        return {}

    @app.get("/undecorated")
    @authorize("edit-post", "post")
    async def undecorated(post_id: int = 10):
        return {}

    return app
