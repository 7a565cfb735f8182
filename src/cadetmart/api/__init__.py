# CadetMart API package.
# Created: 2026-10-19
#
# serve.py builds the FastAPI app; v1/ holds the versioned routers.
