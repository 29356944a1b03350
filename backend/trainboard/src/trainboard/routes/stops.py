from trainboard.models import Stop
from trainboard.routes.crud import build_crud_router


router = build_crud_router(Stop, "/stops", ["stops"])
