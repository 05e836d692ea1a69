from fastapi import APIRouter, Request

router = APIRouter(prefix="/slack", tags=["slack"])

WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route("/events", methods=WEBHOOK_METHODS)
async def slack_events(request: Request):
    return await request.app.state.webhook.handle_webhook(request)


@router.api_route("/", methods=WEBHOOK_METHODS)
async def slack_webhook(request: Request):
    return await request.app.state.webhook.handle_webhook(request)
