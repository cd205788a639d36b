from flask import Blueprint, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Skull King Api'})

@main.route('/health')
def health():
    return jsonify({'status': 'healthy'})
