# didadmin/extensions.py
# -*- coding: utf-8 -*-
"""
Flask extensions instances and configuration.
Central place to initialize extensions to avoid circular imports.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
import os

# Database ORM: backs the 'database' storage backend
db = SQLAlchemy()

# Database Migrations: Handles schema migrations using Alembic
# extensions.py lives in didadmin/, migrations/ sits next to it at the project root
migrations_dir = os.path.join(os.path.dirname(__file__), '..', 'migrations')

migrate = Migrate(directory=migrations_dir)

# Record stores: one per entity, bound to the storage backend chosen in config
from didadmin.storage.registry import StoreRegistry  # noqa: E402

stores = StoreRegistry()
