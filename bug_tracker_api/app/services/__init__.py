"""
Service layer.

Each service encapsulates the business logic of one entity: identifier
validation, existence checks, reference resolution, association
bookkeeping and merge-patch handling.  Services work on domain
entities and delegate storage to the repositories, so API handlers
only translate between HTTP and these calls.
"""
