# main.py

from dotenv import load_dotenv
load_dotenv(override=True)

from delivery_api import create_app

# Uvicorn memanggil factory ini karena dijalankan dengan factory=True
app = create_app
