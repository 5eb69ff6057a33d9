# Services package init
"""
NoteAPI Backend — Services Layer
==================================

What:  The collaborators behind the routes and the AuthGate.

Service Inventory:
    - NoteStore: In-memory note collection owned by the app instance
    - AdminDirectory (abstract): Source of the admin allow-list
    - StaticAdminDirectory / FileAdminDirectory: Concrete allow-list sources
"""
