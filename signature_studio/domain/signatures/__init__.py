"""Signature domain - CRUD, previews and export endpoints"""
