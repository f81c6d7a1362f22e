from quizmaster import create_app

app = create_app()

if __name__ == "__main__":
    # Threaded so a slow password hash never holds up other requests
    app.run(threaded=True)
