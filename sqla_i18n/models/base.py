from sqlalchemy.orm import declarative_base


def make_base():
    """Fresh declarative base with its own MetaData and class registry."""
    return declarative_base()


Base = make_base()
