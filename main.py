import uvicorn

from backend.core.config import PORT

# Run the House Planner API
# E.g. python main.py, then open http://localhost:8080/docs
if __name__ == "__main__":
  uvicorn.run("backend.main:app", host="0.0.0.0", port=PORT, reload=False)
