"""Command-line front end and weekly scheduler for plan_generator."""
