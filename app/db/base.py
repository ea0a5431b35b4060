# Import all models here so Alembic and create_all can see them
from app.db.session import Base

from app.modules.user_management.models.user import User
from app.modules.posts.models.post import Post
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.models.reaction import Reaction
from app.modules.express.models.order import ExpressOrder
from app.modules.notifications.models.notification import Notification
