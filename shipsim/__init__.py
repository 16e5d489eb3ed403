"""Ship and island world simulation."""
