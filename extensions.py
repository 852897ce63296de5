from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager

from metrics import StatsdMetrics
from notifications import SnsNotifier

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
notifier = SnsNotifier()
metrics = StatsdMetrics()
