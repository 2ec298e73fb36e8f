"""
Demo users service.

A minimal application showing the extractor and the response wired into
a FastAPI app. Run with ``uvicorn fastapi_xml.demo.main:app``.
"""
