import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from slack_handler import handle_command
from trumpify.config import COMMAND_PATH
from trumpify.strategies import drain_background


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # let paired replies finish before the worker goes away
    await drain_background()


app = FastAPI(lifespan=lifespan)


# HEALTHCHECK FOR CLOUD RUN
@app.get("/")
async def root():
    return {"status": "ok"}


@app.api_route(COMMAND_PATH, methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def trumpify(req: Request):
    return await handle_command(req)


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8080))
    uvicorn.run("main:app", host="0.0.0.0", port=port)
