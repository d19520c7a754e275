# config.py
import os
from datetime import timedelta

class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "change_me")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///simple_form.db" # instanceディレクトリの下に作られます
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # 起動時に db.create_all() でテーブルを作成する（本番は flask db upgrade を推奨）
    CREATE_TABLES = os.environ.get("CREATE_TABLES", "1") == "1"

    # ===== セッション（サーバサイド・DB）設定 =====
    SESSION_TYPE = "sqlalchemy"
    SESSION_PERMANENT = True
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    # 本番運用時はHTTPS前提で有効化してください
    # SESSION_COOKIE_SECURE = True

    # CSRF トークンの有効期限（24時間）
    WTF_CSRF_TIME_LIMIT = 60 * 60 * 24  # 24 hours

    # ============== ログ ==============
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    # テストでは Flask 標準のクッキーセッションを使う
    SESSION_TYPE = None
    CREATE_TABLES = True
    LOG_LEVEL = "DEBUG"
