import logging

from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

from gfx_interpreter.api.routes import router  # noqa: E402
from gfx_interpreter.config import settings  # noqa: E402

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Scene Change Interpreter API",
    description="Turn AI chat replies into validated broadcast-graphics change sets and resolve their image placeholders",
    version="0.1.0",
)

app.include_router(router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("gfx_interpreter.main:app", host=settings.host, port=settings.port, reload=True)
