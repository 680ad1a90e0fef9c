# manage.py

from dotenv import load_dotenv
load_dotenv()

import asyncio
import typer
import uvicorn
from typing import Optional
from typing_extensions import Annotated

# Typer untuk command CLI project (init-db, create-admin, run)
cli = typer.Typer(
    help="Manajemen CLI untuk Delivery Order API."
)

# --- Database Commands ---

@cli.command()
def init_db():
    """
    Inisialisasi database dan membuat semua tabel.
    """
    # Import dependency di dalam fungsi agar tidak dieksekusi saat startup
    from delivery_api.database import create_tables

    typer.echo("Membuat semua tabel sesuai models...")
    asyncio.run(create_tables())
    typer.secho("Database berhasil diinisialisasi.", fg=typer.colors.GREEN)

# --- User Management Commands ---

@cli.command()
def create_admin(
    username: Annotated[str, typer.Argument(help="Username untuk admin baru.")],
    email: Annotated[str, typer.Argument(help="Email untuk admin baru (harus unik).")],
    password: Annotated[str, typer.Argument(help="Password untuk admin baru.")],
    full_name: Annotated[Optional[str], typer.Option(help="Nama lengkap; default dari username.")] = None
):
    """
    Membuat user baru dengan role 'admin'.
    """
    from delivery_api.config import settings
    from delivery_api.database import AsyncSessionLocal
    from delivery_api.services import UserService
    from delivery_api.services.exceptions import DeliveryError

    async def add_admin_user():
        typer.echo(f"Mencoba membuat admin '{username}'...")
        async with AsyncSessionLocal() as session:
            user_service = UserService(session, config=settings.model_dump())
            return await user_service.bootstrap_admin({
                'username': username,
                'email': email,
                'password': password,
                'full_name': full_name or username.capitalize(),
            })

    try:
        new_user = asyncio.run(add_admin_user())
    except DeliveryError as e:
        typer.secho(f"Gagal membuat admin: {e.message}", fg=typer.colors.RED)
        for error in getattr(e, 'errors', []):
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho(f"Admin '{new_user['username']}' berhasil dibuat!", fg=typer.colors.GREEN)


# --- Server Commands ---

@cli.command()
def run(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = True
):
    """
    Menjalankan development server Uvicorn.
    """
    typer.echo(f"Menjalankan server di http://{host}:{port}")
    uvicorn.run("main:app", host=host, port=port, reload=reload, factory=True)


if __name__ == "__main__":
    cli()
