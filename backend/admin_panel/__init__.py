from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from datetime import timedelta
from typing import Optional, Dict, Any
import os

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()


def create_app(config: Optional[Dict[str, Any]] = None):
    global db_engine, SessionLocal
    app = Flask(__name__)

    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(hours=int(os.getenv('JWT_EXPIRES_HOURS', '12')))
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', 'sqlite:///panel.db')
    app.config['API_BASE_URL'] = os.getenv('API_BASE_URL', 'http://localhost:3000/api')
    app.config['API_TIMEOUT'] = float(os.getenv('API_TIMEOUT', '10'))
    app.config['ADMIN_ROLE_NAME'] = os.getenv('ADMIN_ROLE_NAME', 'SUPER_ADMIN')
    app.config['API_TRANSPORT'] = None

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    # Session store database
    db_url = app.config['DATABASE_URL']
    if db_url.endswith(':memory:'):
        # Ensure a single shared in-memory SQLite database across all sessions
        db_engine = create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_engine = create_engine(db_url, echo=False, future=True)
    SessionLocal = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))

    from .models.session_store import Base
    Base.metadata.create_all(db_engine)

    jwt.init_app(app)

    # Collaborators: the session context is loaded from the durable store once, here
    from .extensions import EXTENSION_KEY
    from .services.api_client import ApiClient
    from .services.session import SessionStore, SessionContext
    from .services.login import LoginFlow
    from .services.permission_registry import PermissionRegistry
    from .services.role_assignment import RoleService
    from .services.tickets import TicketService
    from .services.organizations import OrganizationService
    from .utils.inflight import InFlightGuard

    session_ctx = SessionContext(SessionStore(SessionLocal)).load()
    api = ApiClient(
        app.config['API_BASE_URL'],
        token_provider=session_ctx.token,
        timeout=app.config['API_TIMEOUT'],
        transport=app.config['API_TRANSPORT'],
    )
    app.extensions[EXTENSION_KEY] = {
        'session': session_ctx,
        'api': api,
        'login_flow': LoginFlow(api, session_ctx, admin_role=app.config['ADMIN_ROLE_NAME']),
        'inflight': InFlightGuard(),
        'permissions': PermissionRegistry(api),
        'roles': RoleService(api),
        'tickets': TicketService(api),
        'organizations': OrganizationService(api),
    }

    from .routes.auth import auth_bp
    from .routes.permissions import perms_bp
    from .routes.roles import roles_bp
    from .routes.tickets import tickets_bp
    from .routes.organizations import orgs_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(perms_bp, url_prefix='/permissions')
    app.register_blueprint(roles_bp, url_prefix='/roles')
    app.register_blueprint(tickets_bp, url_prefix='/tickets')
    app.register_blueprint(orgs_bp, url_prefix='/organizations')

    @app.route('/healthz')
    def health():
        return {'status': 'ok', 'authenticated': session_ctx.is_authenticated}

    @app.teardown_appcontext
    def remove_db_session(exc):  # type: ignore
        SessionLocal.remove()

    from .errors import PanelError

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, PanelError):
            if e.status_code >= 500:
                app.logger.warning('%s: %s', type(e).__name__, e.message)
            return e.to_payload(), e.status_code
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    return app
