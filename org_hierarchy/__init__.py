"""Organization hierarchy service: organizations, brands, businesses and franchises."""
