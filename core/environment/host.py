import os


def get_host_for_locust_testing():
    return os.getenv("LOCUST_HOST", "http://localhost:5000")
