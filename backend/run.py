from skullking import create_app

app = create_app()
 
if __name__ == '__main__':
    # Polling clients only; the plain dev server is enough
    app.run(debug=True)
