import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.core.errors import register_exception_handlers
from backend.database import Base, describe_database, dispose_engine, engine, ensure_user_schema
from backend.models import user
from backend.routes import auth_routes, user_routes
from backend.uploads import ensure_upload_directory

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='Staff Directory API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

register_exception_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    upload_dir = ensure_upload_directory()
    logger.info('Serving uploaded photos from %s at %s', upload_dir.resolve(), config.STATIC_MOUNT_PATH)

    try:
        Base.metadata.create_all(bind=engine, tables=[user.User.__table__])
        ensure_user_schema()
        logger.info('Connected to %s', describe_database())
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and MySQL credentials.')


@app.on_event('shutdown')
def close_database() -> None:
    dispose_engine()


@app.get('/')
def root():
    return {'status': 'Staff Directory API Running'}


app.include_router(auth_routes.router)
app.include_router(user_routes.router)
app.mount(config.STATIC_MOUNT_PATH, StaticFiles(directory=config.UPLOAD_DIR, check_dir=False), name='img')
