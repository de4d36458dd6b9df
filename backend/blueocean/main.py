from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Server is running'})


@main.route('/api/state')
def get_state():
    """Returns the same filtered state the Socket.IO clients receive."""
    router = current_app.extensions['blueocean']
    return jsonify(router.snapshot())
