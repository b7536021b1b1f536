"""Serverless function that grants the admin label to identity-service users."""
