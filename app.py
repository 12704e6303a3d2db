import os

from flask import Flask, request, jsonify
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from extensions import db, login_manager, cors
from models import BoardUser, Task, utc_now_iso

app = Flask(__name__)

app.config['SECRET_KEY'] = os.environ.get("TASKBOARD_SECRET_KEY", "taskboard-dev-key")
app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get("TASKBOARD_DATABASE_URI", "sqlite:///tasks.db")
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['CORS_ORIGINS'] = os.environ.get("TASKBOARD_CORS_ORIGINS", r"^http://localhost(:\d+)?$")

# Initialize extensions
db.init_app(app)
login_manager.init_app(app)
cors.init_app(
    app,
    resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}},
    supports_credentials=True,
)

with app.app_context():
    db.create_all()


def request_json(req):
    # Only a JSON object carries fields; arrays and scalars count as an empty body
    data = req.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def request_user_id(req):
    # Header wins over the cookie; the browser board sends both
    return req.headers.get("x-user-id") or req.cookies.get("user_id")


@login_manager.request_loader
def load_user_from_request(request):
    user_id = request_user_id(request)
    if not user_id:
        return None
    return BoardUser(user_id)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"error": "User ID required"}), 400


@app.before_request
def log_request():
    app.logger.info(f"[{request.method}] {request.url}")
    user_id = request_user_id(request)
    if user_id:
        app.logger.info(f"User ID: {user_id}")
    else:
        app.logger.warning("No User ID found in request")


@app.errorhandler(SQLAlchemyError)
def database_error(error):
    db.session.rollback()
    app.logger.exception(f"Database error on {request.method} {request.path}")
    return jsonify({"error": "Database error"}), 500


@app.errorhandler(404)
@app.errorhandler(405)
def http_error(error):
    return jsonify({"error": error.description}), error.code


@app.route("/api/tasks", methods=["GET"])   # This function lists every task of the current user
@login_required
def list_tasks():
    tasks = (
        Task.query.filter_by(user_id=current_user.id)
        .order_by(Task.created_at, Task.id)
        .all()
    )
    return jsonify([task.to_dict() for task in tasks])


@app.route("/api/tasks", methods=["POST"])  # This function stores a task created on the board
@login_required
def create_task():
    data = request_json(request)
    task_id = data.get("id")
    column_id = data.get("columnId")
    content = data.get("content")

    # Presence check only, column values are not validated
    if not task_id or not column_id or content is None:
        return jsonify({"error": "id, columnId and content are required"}), 400

    new_task = Task(
        id=task_id,
        column_id=column_id,
        content=content,
        user_id=current_user.id,   # scope task to the caller
        created_at=data.get("createdAt") or utc_now_iso(),
    )

    db.session.add(new_task)
    db.session.commit()

    return jsonify({"success": True})


@app.route("/api/tasks/<task_id>", methods=["PUT"])   # This is the function to move or edit a task
@login_required
def update_task(task_id):
    data = request_json(request)

    updates = {}
    if data.get("columnId") is not None:
        updates["column_id"] = data["columnId"]
    if data.get("content") is not None:
        updates["content"] = data["content"]

    # Rows owned by someone else (or missing) are left alone without complaint
    if updates:
        Task.query.filter_by(id=task_id, user_id=current_user.id).update(updates)
        db.session.commit()

    return jsonify({"success": True})


@app.route("/api/tasks/<task_id>", methods=["DELETE"]) # This is the function used to delete a task
@login_required
def delete_task(task_id):
    Task.query.filter_by(id=task_id, user_id=current_user.id).delete()
    db.session.commit()

    return jsonify({"success": True})


@app.cli.command("init-db")
def init_db():                 # Create the tasks table if it does not exist yet
    db.create_all()
    app.logger.info(f"Tables ready at {app.config['SQLALCHEMY_DATABASE_URI']}")


if __name__ == "__main__":
    app.run(port=int(os.environ.get("TASKBOARD_PORT", 3000)), debug=True)
