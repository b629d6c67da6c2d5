"""SchoolHub - school management API."""
