"""Adapters: Streamlit dashboard and command-line entry points."""
