from .form import Form
from .response import Response
