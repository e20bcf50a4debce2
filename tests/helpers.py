def add(session, *entries):
    """Submit (name, size) pairs and return the created estimates."""
    return [session.submit_estimate(name, size) for name, size in entries]
