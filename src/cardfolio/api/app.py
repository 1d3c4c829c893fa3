import uvicorn
from fastapi import FastAPI

from cardfolio.api.routes.cards import router as cards_router
from cardfolio.api.routes.health import router as health_router
from cardfolio.api.routes.strategy import router as strategy_router
from cardfolio.config import configure_logging, settings

app = FastAPI(title="Cardfolio API", version="0.1.0")
app.include_router(health_router)
app.include_router(cards_router)
app.include_router(strategy_router)


def run() -> None:
    configure_logging()
    uvicorn.run("cardfolio.api.app:app", host=settings.app_host, port=settings.app_port, reload=False)
