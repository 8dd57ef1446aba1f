from contextlib import asynccontextmanager

from fastapi import FastAPI

from slot_manager.api.container import get_container
from slot_manager.api.routes.slots import router as slots_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = get_container()
    container.start()
    yield
    container.shutdown()


app = FastAPI(title="llama.cpp Slot Manager API", lifespan=lifespan)

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(slots_router)
