"""Infrastructure layer: segmentation, detectors, cache, model services"""
