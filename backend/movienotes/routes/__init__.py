# Routes package init
"""
MovieNotes Backend: API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - movies.py:  GET    /movies            (list notes, newest first)
                  POST   /movies            (create a note)
                  DELETE /movies/{id}       (delete notes by TMDB id)
    - health.py:  GET    /health            (service health check)

Routes stay thin: FastAPI decodes the request, the service talks to the
store, the route returns the result.
"""
