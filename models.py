from extensions import db
from flask_login import UserMixin
from datetime import datetime, timezone


def utc_now_iso():
    return datetime.now(timezone.utc).isoformat()


class BoardUser(UserMixin):                           # Anonymous board owner, identified only by a client id
    def __init__(self, user_id):
        self.id = user_id


class Task(db.Model):                                 # Model for storing the cards of a board
    __tablename__ = "tasks"

    # Rows are keyed per user so client-generated ids never collide across boards
    user_id = db.Column(db.Text, primary_key=True)
    id = db.Column(db.Text, primary_key=True)
    column_id = db.Column(db.Text, nullable=False)    # 'todo' | 'in-progress' | 'done'
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.Text, nullable=False, default=utc_now_iso)

    def to_dict(self):
        return {
            "id": self.id,
            "columnId": self.column_id,
            "content": self.content,
            "userId": self.user_id,
            "createdAt": self.created_at,
        }

    def __repr__(self):
        return f"<Task {self.id} in {self.column_id}>"
