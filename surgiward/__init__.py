"""Project package for the surgical ward backend."""
