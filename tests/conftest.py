import os

# the module-level engine in api.models is built on import
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
