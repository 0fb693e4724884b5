from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add the root directory to the Python path
sys.path.append(str(Path(__file__).parent.parent))

from api.graph_router import router as graph_router

app = FastAPI(
    title="Relgraph API",
    description="Relationship graph engine for user-authored characters.",
    version="1.0.0"
)

# The rendering front end runs on a separate origin during development.
origins = [
    "http://localhost",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graph_router)

@app.get("/")
def read_root():
    return {"message": "Relgraph API is running."}
