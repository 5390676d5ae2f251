"""Django project package for the medbook scheduling backend."""
