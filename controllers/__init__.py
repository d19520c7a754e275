# controllers/__init__.py
from flask import Flask
from .users_controller import user_bp
from .simple_controller import simple_bp


def register_blueprints(app: Flask):
    # ログイン・ユーザー登録
    app.register_blueprint(user_bp, url_prefix="/users")
    # シンプルフォームの入力画面
    app.register_blueprint(simple_bp, url_prefix="/forms/simple")
