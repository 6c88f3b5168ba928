from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base of the station and regression-model tables.

    Every ORM model inherits from it so that `init_db` creates its table.
    """
    pass
