"""HTTP routes of the items API."""
