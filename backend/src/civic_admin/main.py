# main.py
# Entry point for the admin HTTP service.
# - Initializes FastAPI app
# - Registers the reports API routes
# - Provides root health-check endpoint
# - Run with: uvicorn civic_admin.main:app --reload
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from civic_admin.api import report_router

app = FastAPI(
    title="Civic Reports Admin API",
    description="Admin view over civic issue reports",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"status": "healthy", "message": "Civic Reports Admin API is running"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(report_router)
