# File: vidcast/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Videos, import requests and confidentiality checks inherit from this.
Base = declarative_base()
