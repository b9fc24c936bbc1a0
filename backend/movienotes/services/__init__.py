# Services package init
"""
MovieNotes Backend: Services Layer
===================================

What:  Store operations sitting between routes (HTTP) and the database.
How:   Services receive the request's AsyncSession and return response models.

Service Inventory:
    - MovieService: list, add and remove movie notes
"""
