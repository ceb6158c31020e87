"""Request Schemas — pydantic models validating every query string and JSON body."""
