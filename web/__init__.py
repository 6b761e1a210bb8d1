"""PD Checker web application."""
