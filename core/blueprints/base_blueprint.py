from flask import Blueprint


class BaseBlueprint(Blueprint):
    def __init__(self, name, import_name, url_prefix=None, template_folder="templates"):
        super().__init__(name, import_name, url_prefix=url_prefix, template_folder=template_folder)
