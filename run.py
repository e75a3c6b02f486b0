"""
Run the API server (PORT env var, default 8080).
Usage: python3 run.py   (from the project root)
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8080")),
        reload=True,
    )
