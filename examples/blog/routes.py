from prowl import DynamicRoute

dynamic_routes = [
    DynamicRoute(
        template="post",
        data_source="posts",
        get_params=lambda post: {"slug": post["slug"]},
        get_path=lambda post: f"blog/{post['slug']}.html",
    ),
]
