"""Personal bookmark manager: URLs grouped under topics, served as a JSON API."""
