"""
Remote Database Models
======================

Flask-SQLAlchemy models backing the remote storage mode, one table per
collection. Column names keep the camelCase record keys so rows map
one-to-one onto the JSON records served by the API.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class RecordMixin:
    # record key -> model attribute
    FIELDS = {}

    def to_dict(self):
        return {key: getattr(self, attr) for key, attr in self.FIELDS.items()}

    @classmethod
    def from_dict(cls, record):
        return cls(**{attr: record[key] for key, attr in cls.FIELDS.items() if key in record})

    def apply(self, changes):
        for key, value in changes.items():
            attr = self.FIELDS.get(key)
            if attr and key != 'id':
                setattr(self, attr, value)


class Message(RecordMixin, db.Model):
    __tablename__ = 'messages'

    id = db.Column(db.BigInteger, primary_key=True, autoincrement=False)
    name = db.Column(db.String(255))
    email = db.Column(db.String(255))
    message = db.Column(db.Text)
    timestamp = db.Column(db.String(64))
    read = db.Column(db.Boolean, nullable=False, default=False)

    FIELDS = {
        'id': 'id', 'name': 'name', 'email': 'email', 'message': 'message',
        'timestamp': 'timestamp', 'read': 'read',
    }


class Project(RecordMixin, db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.BigInteger, primary_key=True, autoincrement=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    image = db.Column(db.Text)
    project_url = db.Column('projectUrl', db.Text)
    created_at = db.Column('createdAt', db.String(64))
    sort_order = db.Column('order', db.Integer, default=0)

    FIELDS = {
        'id': 'id', 'title': 'title', 'description': 'description', 'image': 'image',
        'projectUrl': 'project_url', 'createdAt': 'created_at', 'order': 'sort_order',
    }


class Video(RecordMixin, db.Model):
    __tablename__ = 'videos'

    id = db.Column(db.BigInteger, primary_key=True, autoincrement=False)
    title = db.Column(db.String(255))
    description = db.Column(db.Text)
    video_url = db.Column('videoUrl', db.Text)
    video_id = db.Column('videoId', db.String(32))
    thumbnail = db.Column(db.Text)
    created_at = db.Column('createdAt', db.String(64))
    sort_order = db.Column('order', db.Integer, default=0)

    FIELDS = {
        'id': 'id', 'title': 'title', 'description': 'description', 'videoUrl': 'video_url',
        'videoId': 'video_id', 'thumbnail': 'thumbnail', 'createdAt': 'created_at',
        'order': 'sort_order',
    }


class HeroPhoto(RecordMixin, db.Model):
    __tablename__ = 'hero_photos'

    id = db.Column(db.BigInteger, primary_key=True, autoincrement=False)
    image = db.Column(db.Text)
    alt = db.Column(db.String(255), default='Hero Photo')
    position_x = db.Column('positionX', db.Integer, default=50)
    position_y = db.Column('positionY', db.Integer, default=50)
    created_at = db.Column('createdAt', db.String(64))
    sort_order = db.Column('order', db.Integer, default=0)

    FIELDS = {
        'id': 'id', 'image': 'image', 'alt': 'alt', 'positionX': 'position_x',
        'positionY': 'position_y', 'createdAt': 'created_at', 'order': 'sort_order',
    }


class Resume(RecordMixin, db.Model):
    __tablename__ = 'resume'

    id = db.Column(db.BigInteger, primary_key=True, autoincrement=False)
    path = db.Column(db.Text)
    filename = db.Column(db.String(255))
    created_at = db.Column('createdAt', db.String(64))

    FIELDS = {
        'id': 'id', 'path': 'path', 'filename': 'filename', 'createdAt': 'created_at',
    }


MODELS = {
    'messages': Message,
    'projects': Project,
    'videos': Video,
    'hero_photos': HeroPhoto,
    'resume': Resume,
}
