"""
Pose decoding demo on synthetic network outputs (no trained model required).
"""

import argparse
import json
import logging
import time

from posefinder import Algorithm, DecoderConfiguration, PoseBuilder
from posefinder.data import render_pose_fields, standing_skeleton


def main():
    """Decode a synthetic crowd and print the detected skeletons."""
    parser = argparse.ArgumentParser(description='Synthetic Pose Decoding Demo')
    parser.add_argument('--people', type=int, default=3, help='Number of people to render')
    parser.add_argument('--algorithm', choices=['single', 'multiple'], default='multiple',
                       help='Decoding mode')
    parser.add_argument('--stride', type=int, default=16, help='Output stride')
    parser.add_argument('--image-size', type=int, nargs=2, default=[1280, 720],
                       help='Original image size (width height)')
    parser.add_argument('--max-poses', type=int, default=15, help='Maximum number of poses')
    parser.add_argument('--json', action='store_true', help='Print keypoints as JSON')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s:%(name)s:%(message)s')

    # People stand side by side, 6 cells apart
    skeletons = [standing_skeleton((1 + 6 * i, 1), args.stride) for i in range(args.people)]
    grid_size = (17, 6 * args.people + 1)
    output = render_pose_fields(skeletons, grid_size, args.stride)

    configuration = DecoderConfiguration(max_pose_count=args.max_poses)
    builder = PoseBuilder(output, configuration, input_image_size=tuple(args.image_size))

    start_time = time.time()
    poses = builder.estimate(Algorithm.parse(args.algorithm))
    decode_time = time.time() - start_time

    if args.json:
        print(json.dumps([
            {'confidence': pose.confidence, 'keypoints': pose.to_keypoints()} for pose in poses
        ], indent=2))
        return

    print("Synthetic Pose Decoding Demo")
    print("=" * 40)
    print(f"Model input: {output.model_input_size}, grid: {grid_size}, image: {tuple(args.image_size)}")
    print(f"Decoded {len(poses)} pose(s) in {decode_time * 1000:.1f} ms")

    for i, pose in enumerate(poses):
        print(f"\nPose {i + 1}: confidence {pose.confidence:.3f}")
        for joint in pose.valid_joints():
            print(f"  {joint.name.label:15s} ({joint.position.x:7.1f}, {joint.position.y:7.1f})"
                  f"  {joint.confidence:.2f}")


if __name__ == "__main__":
    main()
