"""
Service layer abstraction.

Services encapsulate the data access logic.  Both the HTTP endpoints
and the console menu call into the same service instance, so neither
interface needs to know how customers are stored.
"""
