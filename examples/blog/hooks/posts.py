"""Blog data hooks, backed by ``posts.json`` beside the project root."""

import json
from pathlib import Path

from prowl import define_hook

POSTS_FILE = Path(__file__).parent.parent / "posts.json"


def load_posts():
    posts = json.loads(POSTS_FILE.read_text(encoding="utf-8"))
    return sorted(posts, key=lambda p: p["date"], reverse=True)


def get_post(params):
    slug = params.get("slug")
    return next((p for p in load_posts() if p["slug"] == slug), None)


hooks = [
    # Collection used by the dynamic route and by the index page.
    define_hook("posts", lambda params: load_posts()),
    define_hook("index", lambda params: load_posts()[:2], key="recent"),
    define_hook("blog/index", lambda params: load_posts(), key="posts"),
    # Detail page: called once per post with {"slug": ...}.
    define_hook("post", get_post),
]
