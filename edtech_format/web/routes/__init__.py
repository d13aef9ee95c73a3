# HTTP routes of the course format web adapter.
