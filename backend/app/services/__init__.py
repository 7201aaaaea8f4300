# Services package init
"""
Blog API Backend - Services Layer
==================================

Service Inventory:
    - AuthService: login and bearer-token verification, built from a
      CredentialVerifier and a TokenService
    - PostService: post CRUD rules on top of a PostStore

Services can be unit-tested without HTTP; routes only translate HTTP to
service calls.
"""
