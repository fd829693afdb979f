from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    pass

# Importa los modelos para que queden registrados en Base.metadata (create_all)
from app.db.models import appointment, bot_config, business_rule, product  # noqa: E402,F401
