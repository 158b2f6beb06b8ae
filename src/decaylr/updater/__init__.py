from .updater import UPDATERS, Updater, Sgd, Adam
