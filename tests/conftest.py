import pytest
from sqlalchemy.orm import sessionmaker

from sqla_i18n import SQLAlchemyI18n, build_engine, make_base

from .helpers import DEFAULT_LANGUAGE, LANGUAGES, define_test_model


@pytest.fixture
def base():
    return make_base()


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def make_i18n(base, session_factory):
    def _make(**options):
        options.setdefault("languages", LANGUAGES)
        options.setdefault("default_language", DEFAULT_LANGUAGE)
        return SQLAlchemyI18n(base, **options).init(session_factory)

    return _make


@pytest.fixture
def i18n(make_i18n):
    return make_i18n()


@pytest.fixture
def model(i18n, base, engine):
    model = define_test_model(i18n)
    base.metadata.create_all(engine)
    return model


@pytest.fixture
def session(session_factory, model):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def created(session, model):
    """Instance id=1 created with the default language."""
    instance = model(id=1, label="test", reference="random")
    session.add(instance)
    session.commit()
    return instance
