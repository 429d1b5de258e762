"""Database metadata — SQLAlchemy declarative Base shared by ORM models and Alembic."""
