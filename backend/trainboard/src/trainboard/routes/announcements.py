from trainboard.models import Announcement
from trainboard.routes.crud import build_crud_router


router = build_crud_router(Announcement, "/announcements", ["announcements"])
