from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes.chords import router as chords_router

app = FastAPI(title="Pythagorean Chord Tool")

# CORS: the browser UI dev server calls the API directly
# localhost and 127.0.0.1 are distinct origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chords_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Return a simple liveness check."""
    return {"status": "ok"}
