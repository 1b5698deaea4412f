from trebekbot import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # SocketIO's runner also hosts the background timer workers
    socketio.run(app, debug=True)
