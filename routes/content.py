from flask import Blueprint, abort, render_template

from models import db
from models.content import BlogPost

content_bp = Blueprint("content", __name__)


@content_bp.get("/blog/<int:post_id>")
def show_post(post_id: int):
    post = db.session.get(BlogPost, post_id)
    if not post:
        abort(404)
    return render_template("post.html", post=post)
