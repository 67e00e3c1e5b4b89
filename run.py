import eventlet
eventlet.monkey_patch()

# Обычные импорты
import argparse
from colorful_birds import create_app

print("[colorful-birds] Eventlet monkey-patch применен, создаем стол Colorful Birds.")

# Создаем приложение
app, socketio = create_app()

if __name__ == '__main__':

    # Настраиваем парсер аргументов
    parser = argparse.ArgumentParser(description='Запуск Flask-SocketIO сервера игрового стола.')

    parser.add_argument(
        '-e', '--env',
        default='local',
        choices=['local', 'prod'],
        help='Режим запуска: local (для разработки) или prod (для боевого сервера). По умолчанию: local.'
    )

    args = parser.parse_args()

    if args.env == 'prod':
        print("[colorful-birds] Стол Colorful Birds: режим PRODUCTION (prod) на 0.0.0.0:5000...")

        socketio.run(app,
                     host='0.0.0.0',
                     port=5000,
                     debug=False
                    )

    else:
        print("[colorful-birds] Стол Colorful Birds: режим LOCAL (dev) на 127.0.0.1:4999...")
        print("[colorful-birds] Включен режим отладки (debug=True).")

        socketio.run(app,
                     host='127.0.0.1',
                     port=4999,
                     debug=True,
                     use_reloader=False,  # перезагрузчик запустил бы второй цикл планировщика
                     allow_unsafe_werkzeug=True
                    )
