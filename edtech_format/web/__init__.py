# Web adapter: components, routes and configuration for the course page.
