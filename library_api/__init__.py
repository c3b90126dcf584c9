from flask import Flask

from library_api.config import Config
from library_api.extensions import db, migrate, jwt, mail
from library_api.utils.responses import ok


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # models must be imported before the mappers are configured
    from library_api import models  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    from library_api.utils.handlers import register_error_handlers, register_jwt_handlers
    register_error_handlers(app)
    register_jwt_handlers(jwt)

    from library_api.controllers.auth_controller import auth_bp
    from library_api.controllers.book_controller import book_bp
    from library_api.controllers.author_controller import author_bp
    from library_api.controllers.category_controller import category_bp
    from library_api.controllers.publisher_controller import publisher_bp
    from library_api.controllers.shelf_controller import shelf_bp
    from library_api.controllers.borrow_controller import borrow_bp
    from library_api.controllers.reservation_controller import reservation_bp
    from library_api.controllers.fine_controller import fine_bp
    from library_api.controllers.notification_controller import notif_bp
    for bp in (auth_bp, book_bp, author_bp, category_bp, publisher_bp, shelf_bp,
               borrow_bp, reservation_bp, fine_bp, notif_bp):
        app.register_blueprint(bp)

    from library_api.cli import register_commands
    register_commands(app)

    @app.get("/health")
    def health():
        return ok({"ok": True})

    return app
