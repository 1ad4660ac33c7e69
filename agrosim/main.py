from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrosim.core.config import settings
from agrosim.core.errors import register_error_handlers
from agrosim.core.middleware import ExceptionLoggingMiddleware, RequestLoggingMiddleware

from agrosim.api.v1.health import router as health_router
from agrosim.api.v1.environment import router as environment_router
from agrosim.api.v1.simulation import router as simulation_router


app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)

register_error_handlers(app)

app.include_router(health_router, prefix="/api/v1")
app.include_router(environment_router, prefix="/api/v1")
app.include_router(simulation_router, prefix="/api/v1")

@app.get("/")
def root():
    return {"status": "AgroSim backend running"}
