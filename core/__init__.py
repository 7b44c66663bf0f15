"""Core Greenhouse job post automation: scanning, transforming and replaying posts."""
