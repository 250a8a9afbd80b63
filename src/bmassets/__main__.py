from bmassets.cli import app

app(prog_name='bmassets')
