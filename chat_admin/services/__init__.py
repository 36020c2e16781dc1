from chat_admin.services.activity_service import ActivityService
from chat_admin.services.analytics_service import AnalyticsService
from chat_admin.services.conversation_service import ConversationService
from chat_admin.services.dashboard_service import DashboardService
from chat_admin.services.message_service import MessageService
from chat_admin.services.user_service import UserService

__all__ = [
    "ActivityService",
    "AnalyticsService",
    "ConversationService",
    "DashboardService",
    "MessageService",
    "UserService",
]
