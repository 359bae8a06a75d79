"""Default dimensions and colors for tile preview rendering."""

# Горизонтальный размер чанка источника данных (блоков)
CHUNK_SIZE_X = 32
CHUNK_SIZE_Z = 32

# Вертикальный размер чанка (блоков)
CHUNK_SIZE_Y = 64

# Тайл превью покрывает 2x2 чанка
TILE_SIZE_X = CHUNK_SIZE_X * 2
TILE_SIZE_Z = CHUNK_SIZE_Z * 2

# Высота запрашиваемого объёма в чанках (нужно для деревьев и т.п.)
VERTICAL_CHUNKS = 4

# Префикс имён рабочих потоков
TILE_THREAD_PREFIX = 'Tile'

# Фон тайла до наложения слоёв (RGBA)
TILE_BACKGROUND = (0, 0, 0, 255)

# Фон итогового буфера там, где тайла нет (RGBA)
OUTPUT_BACKGROUND = (0, 0, 0, 0)

# Цвет осевых линий через (0, 0)
AXIS_COLOR = (128, 128, 128, 255)

# Режим пикселей всех буферов
IMAGE_MODE = 'RGBA'

# Количество компонент цвета
RGB_COMPONENTS = 3
RGBA_COMPONENTS = 4
