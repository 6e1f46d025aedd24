class BaseService:
    def __init__(self, repository):
        self.repository = repository

    def list(self, **kwargs):
        return self.repository.list(**kwargs)

    def create(self, **kwargs):
        return self.repository.create(**kwargs)
