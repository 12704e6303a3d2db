from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS

db = SQLAlchemy()   # Creating an instance of SQLAlchemy
login_manager = LoginManager()   # Resolves the board user from each request
cors = CORS()   # Lets the browser board on localhost call the API
