# main.py
"""
Main entry point for the Neural Particles effect.

This script runs the effect in a resizable window:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Creates the window, whose client area is the host region.
4. Creates the particle network and pumps one frame per display refresh.
5. Handles clean shutdown.
"""
import logging
import cProfile
import pstats
import io
import pygame
from utils import setup_logging, load_config
from constants import WINDOW_TITLE, DEFAULT_WINDOW_SIZE, FPS, BACKGROUND_COLOR


def main():
    """
    The main function to run the effect.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Neural Particles Starting ---")

    run_params = config.get('run_control', {})
    window_params = config.get('window', {})

    from host import HostRegion
    from network import create_neural_network
    from scheduler import FrameScheduler

    pygame.init()
    width = window_params.get('width', DEFAULT_WINDOW_SIZE[0])
    height = window_params.get('height', DEFAULT_WINDOW_SIZE[1])
    background = tuple(window_params.get('background_color', BACKGROUND_COLOR))
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption(WINDOW_TITLE)
    clock = pygame.time.Clock()

    # The whole client area hosts the effect.
    host = HostRegion(screen.get_rect())
    scheduler = FrameScheduler()
    network = create_neural_network(host, config.get('network'), scheduler)

    fps = run_params.get('fps', FPS)
    log_throttle = run_params.get('log_throttle_frames', 300)
    max_frames = run_params.get('max_frames', 0)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    running = True
    frame_num = 0

    if profiler:
        profiler.enable()
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received.")
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed.")
                running = False
            elif event.type == pygame.VIDEORESIZE:
                host.resize(event.w, event.h)

        scheduler.tick()

        screen.fill(background)
        host.render(screen)
        pygame.display.flip()
        clock.tick(fps)
        frame_num += 1

        # Hot loops must throttle logs
        if network is not None and frame_num % log_throttle == 0:
            logging.info(
                f"Frame {frame_num} | {network.evaluator.last_connection_count} connections | "
                f"{clock.get_fps():.1f} FPS"
            )

        if max_frames and frame_num >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping.")
            running = False
    if profiler:
        profiler.disable()

    if network is not None:
        network.destroy()
    pygame.quit()
    logging.info("Render loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Neural Particles Shutting Down ---")


if __name__ == "__main__":
    main()
