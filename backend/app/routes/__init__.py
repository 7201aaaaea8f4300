# Routes package init
"""
Blog API Backend - API Routes Package
======================================

Route Inventory:
    - auth.py:   POST /login
    - posts.py:  GET /posts, GET /posts/{id}, POST /posts,
                 PUT /posts/{id}, DELETE /posts/{id}

Routes stay THIN: they extract path and body, call a service, and return
its result. Failures are raised, never rendered here.
"""
