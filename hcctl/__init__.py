"""hcctl package: inspect healthchecks checks and pings from a terminal."""
