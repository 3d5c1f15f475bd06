from datetime import datetime
from models.db import db


class GalleryImage(db.Model):
    __tablename__ = "gallery_images"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(160), nullable=True)
    image_url = db.Column(db.String(500), nullable=False)
    source = db.Column(db.String(20), nullable=False, default="upload")  # upload, instagram
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)


class BlogPost(db.Model):
    __tablename__ = "blog_posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    body = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
