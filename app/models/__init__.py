from .client import Client
from .expense import Expense
from .payment_history import PaymentHistory
from .project import Project
from .user import User
