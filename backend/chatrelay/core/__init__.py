# chatrelay/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Startup tasks (default agent account)
- db: Database configuration and connection management
- errors: Exception taxonomy shared by stores, gateway and relay
- pubsub: Per-agent notification hub
- security: Password hashing and session token issuance
"""
