import logging

from flask import Flask, redirect, url_for
from config import Config
from extensions import db, csrf, migrate, login_manager
from extensions import server_session as session_ext
from flask_wtf.csrf import generate_csrf
from controllers import register_blueprints
from models import load_models


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")), logging.INFO)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
    )
    app.logger.setLevel(level)


def create_app(config_object=Config, **overrides):
    app = Flask(__name__, template_folder="templates")
    app.config.from_object(config_object)
    app.config.update(overrides)
    configure_logging(app)

    db.init_app(app)
    csrf.init_app(app)
    migrate.init_app(app, db)
    # Flask-Session（DBバックエンド）初期化。SESSION_TYPE=None なら Flask 標準のクッキーセッション
    app.config.setdefault("SESSION_TYPE", "sqlalchemy")
    if app.config["SESSION_TYPE"]:
        app.config["SESSION_SQLALCHEMY"] = db
        app.config.setdefault("SESSION_SQLALCHEMY_TABLE", "flask_sessions")
        app.config.setdefault("SESSION_PERMANENT", True)
        session_ext.init_app(app)
    load_models()
    if app.config.get("CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    @app.context_processor
    def inject_csrf_token():
        # テンプレートで {{ csrf_token() }} として参照可能にする
        return {'csrf_token': generate_csrf}

    # Flask-Loginのセットアップ（ログインは任意。未ログインでもフォームは送信できる）
    login_manager.init_app(app)
    login_manager.login_view = 'users.login'  # ログインページのエンドポイント

    from models.users import Users

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Users, int(user_id))

    @app.route('/')
    def index():
        return redirect(url_for('simple_form.index'))

    register_blueprints(app)
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", debug=True, use_reloader=False)
