# Overview: Flask extension instances shared by the wallet app factory.
# The factory binds them; services receive db.session explicitly.

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()
