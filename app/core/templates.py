import os

from fastapi.templating import Jinja2Templates

# app/core/ -> app/templates
current_dir = os.path.dirname(os.path.abspath(__file__))
templates_dir = os.path.normpath(os.path.join(current_dir, "..", "templates"))

templates = Jinja2Templates(directory=templates_dir)
