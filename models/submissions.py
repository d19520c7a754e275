# models/submissions.py
from extensions import db


class Submissions(db.Model):
    """シンプルフォームの送信内容を保存するテーブル。"""
    __tablename__ = "submissions"
    __table_args__ = (
        # uid は unsigned 扱い（0 は匿名ユーザー）
        db.CheckConstraint("uid >= 0", name="ck_submissions_uid_unsigned"),
    )

    id        = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title     = db.Column(db.String(255), nullable=False, default="", server_default="")
    color     = db.Column(db.SmallInteger, nullable=False, default=0, server_default="0")
    username  = db.Column(db.String(255), nullable=False, default="", server_default="")
    email     = db.Column(db.String(255), nullable=False, default="", server_default="")
    uid       = db.Column(db.Integer, nullable=False, default=0, server_default="0")
    ip        = db.Column(db.String(128), nullable=False, default="", server_default="")
    timestamp = db.Column(db.Integer, nullable=False, default=0, server_default="0")

    def __repr__(self):
        return f"<Submission {self.id} {self.title}>"
