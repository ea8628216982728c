"""Mock POS cart API for local development and integration tests"""
