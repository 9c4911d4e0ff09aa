"""AWS Lambda entry point.

Mangum translates API Gateway events into ASGI so the FastAPI app runs
unchanged as a serverless function.
"""

from mangum import Mangum

from app.main import app

# lifespan="off": Lambda has no startup/shutdown phase to hook into
handler = Mangum(app, lifespan="off")
