from app import create_app

app = create_app()

if __name__ == '__main__':
    # Dev server only; production runs a WSGI server against run:app
    app.run(host='0.0.0.0', port=app.config.get('PORT', 4000), debug=True)
