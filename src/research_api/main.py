"""HTTP front end for the market research agent.

Run with ``python -m research_api.main`` or ``uvicorn research_api.main:app``;
the Anthropic key and optional ``PORT`` are read from the environment or .env.
"""

import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from research_api.api import research

load_dotenv()

app = FastAPI(
    title="Market Research Agent",
    description="Runs web-search backed market research sessions and splits the answer into report sections.",
    version="0.1.0",
)

# The browser form that submits research requests is served from another origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(research.router, prefix="/v1", tags=["research"])


@app.get("/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    uvicorn.run("research_api.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    run()
