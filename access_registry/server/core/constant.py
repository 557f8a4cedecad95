"""Constants shared by the FastAPI application and its routers."""

PROJECT_NAME = "Access Registry"
API_V1_STR = "/api/v1"
API_VERSION = "0.1.0"
SCHEMA_VERSION = "v1"
