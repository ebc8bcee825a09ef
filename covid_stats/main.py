from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from covid_stats.config import settings
from covid_stats.routers import countries, health
from covid_stats.domain.errors import ValidationError
from covid_stats.application.event_handlers import register_event_handlers

app = FastAPI(
    title="COVID Stats API",
    description="Per-country COVID-19 statistics with offline caching",
    version=settings.VERSION,
)

# Register domain event handlers on startup
@app.on_event("startup")
async def startup_event():
    register_event_handlers()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


# Domain error handlers
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(countries.router, tags=["Countries"])

@app.get("/")
async def root():
    return {"message": "Welcome to COVID Stats API. See /docs for API documentation"} 
